"""
Request workflow: ledgers, state machines, approval cascade and returns
"""
