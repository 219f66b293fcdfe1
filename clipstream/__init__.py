"""ClipStream - trimmed YouTube clips with likes and comments"""
