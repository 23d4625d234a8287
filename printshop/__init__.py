"""Print shop operations API - orders, work orders, production and QuickBooks sync"""
