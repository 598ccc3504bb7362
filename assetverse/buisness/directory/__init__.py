"""User directory, HR seat counts and package payments"""
