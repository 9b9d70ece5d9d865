"""
HTTP surfaces of the snapshot service.
"""
