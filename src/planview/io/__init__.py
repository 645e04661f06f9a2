"""Reading and writing layout specifications."""
