"""
tradedesk - stock trading backend.
"""
