"""Key-value storage used to persist users, quotas, limits and statistics.

The storage offers just get/put/delete by key and listing keys by prefix. No
transactions nor compare-and-swap operations are available, so any
read-modify-write sequence performed on top of it can lose updates when two
requests modify the same key concurrently.
"""
