"""Pure physiology calculations: predictions, paces, zones and day-of adjustments."""
