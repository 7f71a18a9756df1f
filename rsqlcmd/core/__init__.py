"""
Core modules for rsqlcmd: script batching, value formatting and rendering.
"""
