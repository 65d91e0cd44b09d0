"""AST module - Normalized syntax trees and declaration extraction."""
