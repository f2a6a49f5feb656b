"""Report generators for rsbindgen"""
