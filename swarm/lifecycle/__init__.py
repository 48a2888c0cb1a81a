"""Story lifecycle: states, transition graph, guards and the FSM."""
