"""Command line interface for rsbindgen"""
