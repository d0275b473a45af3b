"""
Engine configuration package.
"""
