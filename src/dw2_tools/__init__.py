"""Digimon World 2 data file tools."""
