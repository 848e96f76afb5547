"""Pure availability logic: types, calculation and selection."""
