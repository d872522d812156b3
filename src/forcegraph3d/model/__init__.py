"""
The MODEL layer contains pure data structures.
It has NO knowledge of the GUI (Qt).
It deals with the graph, the view state and graph file I/O.
"""
