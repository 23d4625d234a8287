"""Orders domain - orders, order items, notes and payments"""
