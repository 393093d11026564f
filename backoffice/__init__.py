"""Backoffice: admin panel and storefront data access layer"""
