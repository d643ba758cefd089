# demo/scenes/prologue.py
from __future__ import annotations
from typing import Optional

from parley.narrative.dialogue import Dialogue
from parley.narrative.types import ChoiceNode, LineNode


def build_prologue(dialogue: Dialogue, max_attempts: Optional[int] = None) -> Dialogue:
    """
    Sample conversation wired only through the public construction API:

        1 -> 2 -> 3 -> 4 (choice) --"Yes"--> 5 -> 7
                                  --"No"---> 6
    """
    dialogue.insert_node(1, LineNode("First dialogue line!"))

    dialogue.insert_node(2, LineNode("This is the second dialogue line, terminated by a newline."))
    dialogue.connect_nodes(1, 2)

    dialogue.insert_node(3, LineNode("This is the third dialogue line! Very cool!"))
    dialogue.connect_nodes(2, 3)

    ask = ChoiceNode("Do you want to hear one more line?", max_attempts=max_attempts)
    ask.insert_option("Yes", 5)
    ask.insert_option("No", 6)
    dialogue.insert_node(4, ask)
    dialogue.connect_nodes(3, 4)

    dialogue.insert_node(5, LineNode("Here it is: the last line of the demo."))
    dialogue.insert_node(6, LineNode("Alright, maybe next time."))

    dialogue.insert_node(7, LineNode("Thanks for listening!"))
    dialogue.connect_nodes(5, 7)
    return dialogue
