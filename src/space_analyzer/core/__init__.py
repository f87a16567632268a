"""Warstwa logiki domenowej: nawigacja i strumieniowe liczenie rozmiarów."""

from . import locations, models, sizing, sorting
from .navigation import NavigationController, default_size_workers

__all__ = [
	"locations",
	"models",
	"sizing",
	"sorting",
	"NavigationController",
	"default_size_workers",
]
