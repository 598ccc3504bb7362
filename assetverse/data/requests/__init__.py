"""Asset requests and the assignments they produce"""
