"""Logging setup"""
