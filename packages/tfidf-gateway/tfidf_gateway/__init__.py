"""TF-IDF Gateway - REST API for document indexing"""
__version__ = "0.1.0"
