"""Services subpackage - collaborators around the pricing engine."""
