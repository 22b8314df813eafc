"""
The CONTROLLER layer builds, reshapes and flattens geometry.
The factory validates input, the flattener linearises curved trees and the
overlay adapter hands linear geometry to an overlay engine.
"""
