"""Third-party integrations"""
