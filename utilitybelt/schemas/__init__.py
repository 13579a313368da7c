"""
Pydantic models shared by the utilities.
"""
