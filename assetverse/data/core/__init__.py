"""Core records: users, payments and assets"""
