"""Domain layer: templates, value kinds, translation and statement builders."""
