"""
Business logic for MentorConnect.

Every mutating call takes the acting user as an explicit SessionContext.
"""
