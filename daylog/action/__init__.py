"""Service that stores activity categories and the actions logged per day."""