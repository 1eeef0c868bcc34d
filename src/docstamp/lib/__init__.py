"""Library layer: template rendering, binding supply and support code."""
