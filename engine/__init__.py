"""Dreamblock engine - assessment rules, daily check-ins, streaks and rewards."""
from .store import JsonFileStore, MemoryStore, get_store
from .dreams import create_dream, get_dream, list_dreams, release_dream
from .coach import start_session, submit_checkin
