"""Task pipeline: chunking, pattern matching, command resolution and execution plans."""
