import unittest

from enigma_wheels.keyboard import ALPHABET
from enigma_wheels.machine import Machine
from enigma_wheels.wheel import WiringError

WHEEL_I = "EKMFLGDQVZNTOWYHXUSPAIBRCJ"
WHEEL_II = "AJDKSIRUXBLHWTMCQGZNPYFVOE"
WHEEL_III = "BDFHJLCPRTXVZNYEIWGAKMUSQO"
REFLECTOR_B = "YRUHQSLDPXNGOKMIEBFZCWVJAT"


def known_answer_machine(plugboard=ALPHABET):
    machine = Machine(
        plugboard,
        WHEEL_III, 10, 0,
        WHEEL_II, 2, 0,
        WHEEL_I, 12, 0,
        REFLECTOR_B,
    )
    machine.set_triggers([22], [5], [17])
    return machine


class TransformTests(unittest.TestCase):
    def test_full_decryption(self):
        machine = known_answer_machine()
        self.assertEqual(machine.transform_message("QMJIDO MZWZJFJR"), "ENIGMA REVEALED")

    def test_full_encryption_after_reset(self):
        machine = known_answer_machine()
        machine.transform_message("QMJIDO MZWZJFJR")
        machine.set_rotor_positions(10, 2, 12)
        self.assertEqual(machine.transform_message("ENIGMA REVEALED"), "QMJIDO MZWZJFJR")

    def test_self_inverse(self):
        message = "THE QUICK BROWN FOX JUMPS OVER THE LAZY DOG " * 3
        machine = known_answer_machine()
        cipher = machine.transform_message(message)
        self.assertNotEqual(cipher, message)
        machine.set_rotor_positions(10, 2, 12)
        self.assertEqual(machine.transform_message(cipher), message)

    def test_self_inverse_with_any_plugboard(self):
        rotated = ALPHABET[1:] + ALPHABET[0]      # not an involution
        machine = known_answer_machine(rotated)
        cipher = machine.transform_message("ATTACK AT DAWN")
        machine.set_rotor_positions(10, 2, 12)
        self.assertEqual(machine.transform_message(cipher), "ATTACK AT DAWN")

    def test_no_letter_enciphers_to_itself(self):
        machine = known_answer_machine()
        for ch in ALPHABET:
            machine.set_rotor_positions(3, 4, 5)
            self.assertNotEqual(machine.transform_char(ch), ch)

    def test_non_alphabetic_pass_through(self):
        machine = known_answer_machine()
        out = machine.transform_message("A B!C")
        self.assertEqual(out[1], " ")
        self.assertEqual(out[3], "!")
        self.assertEqual(len(out), 5)
        # only the three letters stepped the right rotor
        self.assertEqual(machine.rotor_positions, (13, 2, 12))

    def test_lowercase_is_not_enciphered(self):
        machine = known_answer_machine()
        self.assertEqual(machine.transform_message("enigma"), "enigma")
        self.assertEqual(machine.rotor_positions, (10, 2, 12))

    def test_state_persists_across_calls(self):
        machine = known_answer_machine()
        split = machine.transform_message("QMJIDO") + machine.transform_message(" MZWZJFJR")
        self.assertEqual(split, "ENIGMA REVEALED")

    def test_bad_wiring_rejected_at_construction(self):
        with self.assertRaises(WiringError):
            Machine(ALPHABET, "ABC", 0, 0, WHEEL_II, 0, 0, WHEEL_I, 0, 0, REFLECTOR_B)


class SteppingTests(unittest.TestCase):
    def test_right_rotor_steps_every_key(self):
        machine = known_answer_machine()
        machine.set_rotor_positions(0, 0, 0)
        machine.transform_message("AAAA")
        self.assertEqual(machine.rotor_positions, (4, 0, 0))

    def test_carry_and_double_step(self):
        machine = known_answer_machine()
        machine.set_triggers([6, 13, 20], [1], [])
        machine.set_rotor_positions(0, 0, 0)

        machine.transform_message("AAAAA")
        self.assertEqual(machine.rotor_positions, (5, 0, 0))
        machine.transform_char("A")
        # right hits 6 → middle steps onto 1 → left steps too
        self.assertEqual(machine.rotor_positions, (6, 1, 1))
        machine.transform_message("AAAAAAA")
        self.assertEqual(machine.rotor_positions, (13, 2, 1))

    def test_known_turnover_positions(self):
        machine = known_answer_machine()
        machine.set_rotor_positions(21, 4, 16)
        machine.step()
        self.assertEqual(machine.rotor_positions, (22, 5, 17))

    def test_reset_keeps_triggers_and_rings(self):
        machine = Machine(ALPHABET, WHEEL_III, 0, 3, WHEEL_II, 0, 4, WHEEL_I, 0, 5, REFLECTOR_B)
        machine.set_triggers([1], [2], [3])
        machine.set_rotor_positions(30, 27, -1)
        self.assertEqual(machine.rotor_positions, (4, 1, 25))
        self.assertEqual([r.ring_setting for r in machine.rotors], [3, 4, 5])
        self.assertEqual([set(r.triggers) for r in machine.rotors], [{1}, {2}, {3}])

    def test_plugboard_and_reflector_never_step(self):
        machine = known_answer_machine()
        machine.transform_message(ALPHABET * 30)
        self.assertEqual(machine.plugboard.rotor_position, 0)
        self.assertEqual(machine.reflector.rotor_position, 0)

    def test_repr(self):
        self.assertEqual(repr(known_answer_machine()), "<Machine positions=(10, 2, 12)>")


if __name__ == "__main__":
    unittest.main()
