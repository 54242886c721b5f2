"""Adaptadores de infraestructura (HTTP, imágenes, HTML)."""
