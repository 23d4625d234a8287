"""Standalone routes that do not belong to a single domain"""
