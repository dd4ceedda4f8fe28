"""Helpers for resolving model suggestions against dataset schemas"""
