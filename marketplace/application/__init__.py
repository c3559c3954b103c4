"""Application layer: DTOs, ports (protocols) and services.

Depends only on domain and protocol definitions (DIP).
Infrastructure implements the interfaces (repositories, tokens, event sinks).
"""
