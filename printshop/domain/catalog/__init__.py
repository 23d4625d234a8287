"""Catalog domain - paper products and product types"""
