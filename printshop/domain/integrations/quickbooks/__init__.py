"""QuickBooks integration - OAuth connection, customer sync and invoice sync"""
