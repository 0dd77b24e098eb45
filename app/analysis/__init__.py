"""
Analysis core for the practice coach.

Pure functions over in-memory values: skill tier classification, weak area
detection and problem recommendation. Nothing here touches the database or
the network.
"""
