"""
Core matching and resolution logic.
"""
