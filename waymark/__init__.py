"""
Waymark - Location Experience Preview Engine

Lets an author's location-based experience be walked through as a simulated
visit. The engine provides:
- Project and location records
- Configurable participant scoring
- A visit state machine (homescreen / at location)
- Resolution of scanned codes into navigation intents
"""

__version__ = "0.1.0"
