"""Invoices domain - invoices, invoice items and invoice payments"""
