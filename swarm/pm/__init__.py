"""
PM (Project Management) module for SWARM.

Typed story/retro records and the file operations that read and write
them under .swarm/.
"""
