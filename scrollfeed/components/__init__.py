"""GTK components. Importing a submodule requires PyGObject."""
