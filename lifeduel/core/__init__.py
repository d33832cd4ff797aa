"""Grid state, rules, transition engine and execution governor."""
