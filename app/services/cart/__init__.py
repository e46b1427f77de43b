"""
Cart services package.

Contains the cart controller (including the checkout flow), its
collaborator protocols, action results and the session cart store.
"""
