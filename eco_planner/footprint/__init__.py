"""Footprint estimation: annual lifestyle estimate and per-activity carbon factors."""
