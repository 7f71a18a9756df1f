"""
Command-line interface for rsqlcmd.
"""
