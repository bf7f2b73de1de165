"""Terminal presentation: report rendering and the menu shell."""
