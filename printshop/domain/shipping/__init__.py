"""Shipping domain - shipping info and pickups"""
