"""
Operational scripts (run with python -m devblog.scripts.<name>)
"""
