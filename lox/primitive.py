"""
Build the primitive namespace: the native functions
every fresh interpreter finds among its globals.
"""
import time
from .tree_walker.values import NativeFunction

def _clock() -> float:
	return time.time()

NATIVES = {
	f.name: f for f in [
		NativeFunction("clock", 0, _clock),
	]
}
