"""
Gita Connect push notifications delivered through Firebase Cloud Messaging
"""
