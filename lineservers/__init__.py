"""Line-oriented TCP servers and clients: upper-casing, maximum, timer and thread pool."""

__version__ = "0.1.0"
__all__ = ["upper", "maxnum", "timer", "pool"]