"""Resume extraction"""
