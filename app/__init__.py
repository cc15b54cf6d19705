"""HTTP server for the exporter"""
