"""Engine data model, predicates, edits and rules. No I/O."""
