"""Record-to-row mapping layer.

This module converts decoded export records into destination rows.
It holds every per-file rule and the destination table schemas.
"""
