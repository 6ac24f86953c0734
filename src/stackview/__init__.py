"""View and mutate stacks of dependent branches through the `stack` CLI."""
