"""Offices domain - offices, their addresses and the walk-in counter office"""
