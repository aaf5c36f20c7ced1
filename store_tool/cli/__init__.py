"""Command line interface for store-tool"""
