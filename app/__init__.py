"""TaskMantra notification service package.

Keeps ``app`` a regular package so the local modules win over similarly named
distributions installed in the environment.
"""
