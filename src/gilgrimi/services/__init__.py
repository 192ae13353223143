"""
Gilgrimi Services Layer

Dialog, safety and bot turn handling.
"""
