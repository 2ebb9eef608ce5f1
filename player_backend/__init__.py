"""
Player Backend: CRUD service for game character records.
"""
