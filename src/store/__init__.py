"""Dataset access layer.

This module holds the current canonical dataset in memory and serves
row views, verification results, and exports to callers.
"""
