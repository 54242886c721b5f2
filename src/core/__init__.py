"""Core: dominio, contratos y servicios sin dependencias de I/O concretas."""
