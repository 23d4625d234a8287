"""Cross-domain services: status rules, QuickBooks tokens, PDF documents"""
