"""
Report generation and UI strings.
"""
