"""Project configuration package for the MediLink hospital backend."""
