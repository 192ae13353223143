"""
Gilgrimi Infrastructure Layer

External integrations: intent recognizer, conversation state
storage, database, metrics and error tracking.
"""
