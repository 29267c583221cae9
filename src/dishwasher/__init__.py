"""
Dishwasher: wash-cycle orchestration for a dishwasher appliance.

Coordinates a door sensor, a dirt filter, a water pump and a motor engine
through one strictly ordered wash cycle, reporting success or the first
failure encountered.
"""

__version__ = "0.1.0"
