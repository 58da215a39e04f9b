# Shared helpers for the campus exchange backend
