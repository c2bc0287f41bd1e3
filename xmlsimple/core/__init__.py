"""
Core constants and exceptions shared across the xmlsimple package.
"""
