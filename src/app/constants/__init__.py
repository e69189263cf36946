"""Constantes da aplicação."""
