"""TF-IDF CLI - administration tools"""
__version__ = "0.1.0"
