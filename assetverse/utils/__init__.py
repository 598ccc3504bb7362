"""Logging and log-hygiene utilities"""
