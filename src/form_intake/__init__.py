"""Training feedback form intake service"""
