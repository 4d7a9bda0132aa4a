"""
StudyBridge: backend for a study collaboration app.
"""
