"""
Core components: application factory, lifecycle and exceptions.
"""
