"""Metric models and the exporter registry"""
