"""Companies domain - customer companies, dashboard totals and search"""
