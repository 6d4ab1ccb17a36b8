"""
Token issuance package.
"""
