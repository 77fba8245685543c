"""
skyline - GitHub contribution skylines as ASCII art and printable STL models
"""
from .ascii_art import generate_ascii
from .classifier import classify, classify_level, classify_role
from .errors import GeometryError, NetworkError, SkylineError, SkylineIOError, ValidationError
from .generator import generate_stl, generate_stl_range
from .models import ContributionDay, HeightLevel, StackRole, Triangle
from .stl import read_stl_binary, write_stl_binary

__version__ = "0.1.0"

__all__ = [
    "generate_ascii",
    "classify", "classify_level", "classify_role",
    "GeometryError", "NetworkError", "SkylineError", "SkylineIOError", "ValidationError",
    "generate_stl", "generate_stl_range",
    "ContributionDay", "HeightLevel", "StackRole", "Triangle",
    "read_stl_binary", "write_stl_binary",
]
