"""User domain module.

UserState aggregate, its persisted record codec and the storage/repository ports.
"""
