"""Shared exception types"""
