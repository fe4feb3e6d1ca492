"""
MentorBot: the FAQ chatbot and alumni recommendation flows.
"""
