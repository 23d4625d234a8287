"""Work orders domain - quotes/estimates, their items and notes"""
