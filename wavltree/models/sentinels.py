"""
Sentinel return values for insert and delete.
"""

# insert() on a key that is already present
ALREADY_EXISTS = -1

# delete() on a key that is absent
NOT_FOUND = -1
