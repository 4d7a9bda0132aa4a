"""
Version management for the StudyBridge API
"""
from studybridge.__version__ import __version__

API_VERSION = __version__

# Feature flags
FEATURES = {
    "chat_rooms": True,
    "realtime_ws": True,
    "blocking": True,
}

def get_version_info():
    """Get version and feature information"""
    return {
        "version": API_VERSION,
        "features": FEATURES,
    }
