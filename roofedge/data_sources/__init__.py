"""
Datenquellen der Pipeline.
"""
