"""Common helpers"""
