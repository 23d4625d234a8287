"""Contacts domain - office contact people and walk-in counter customers"""
