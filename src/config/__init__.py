"""Shipped configuration files (factory_defaults.yaml)"""
