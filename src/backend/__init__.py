"""
Wiki Path web backend: FastAPI routes over the wiki_path search core.
"""
