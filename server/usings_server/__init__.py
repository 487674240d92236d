"""
HTTP service that organizes C# using directives for editor integrations.
"""
