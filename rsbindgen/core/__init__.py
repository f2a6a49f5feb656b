"""Comment trees, cursors, loading, options and logging for rsbindgen"""
