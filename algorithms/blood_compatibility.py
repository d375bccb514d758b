"""
Blood Type Compatibility Helper
Determines which donor blood groups can give to which recipient blood groups
"""
from enum import Enum


class BloodGroup(str, Enum):
    O_NEG = 'O-'
    O_POS = 'O+'
    A_NEG = 'A-'
    A_POS = 'A+'
    B_NEG = 'B-'
    B_POS = 'B+'
    AB_NEG = 'AB-'
    AB_POS = 'AB+'

    def __str__(self):
        return self.value


BLOOD_GROUP_CHOICES = [(group.value, group.value) for group in BloodGroup]

# Standard red cell compatibility chart
# Key: recipient (patient), value: compatible donors
COMPATIBILITY = {
    BloodGroup.O_NEG: (BloodGroup.O_NEG,),
    BloodGroup.O_POS: (BloodGroup.O_NEG, BloodGroup.O_POS),
    BloodGroup.A_NEG: (BloodGroup.O_NEG, BloodGroup.A_NEG),
    BloodGroup.A_POS: (BloodGroup.O_NEG, BloodGroup.O_POS, BloodGroup.A_NEG, BloodGroup.A_POS),
    BloodGroup.B_NEG: (BloodGroup.O_NEG, BloodGroup.B_NEG),
    BloodGroup.B_POS: (BloodGroup.O_NEG, BloodGroup.O_POS, BloodGroup.B_NEG, BloodGroup.B_POS),
    BloodGroup.AB_NEG: (BloodGroup.O_NEG, BloodGroup.A_NEG, BloodGroup.B_NEG, BloodGroup.AB_NEG),
    BloodGroup.AB_POS: tuple(BloodGroup),  # Universal recipient
}


def parse_blood_group(value):
    """
    Convert a raw value (e.g. 'ab+' or ' O- ') to a BloodGroup

    Returns:
        BloodGroup, or None when the value is not one of the eight groups
    """
    if isinstance(value, BloodGroup):
        return value
    if not isinstance(value, str):
        return None
    try:
        return BloodGroup(value.strip().upper())
    except ValueError:
        return None


def is_compatible(donor_group, recipient_group) -> bool:
    """
    Check if a donor can give blood to a recipient

    Args:
        donor_group: Donor's blood group (e.g., 'O+')
        recipient_group: Recipient's blood group (e.g., 'A+')

    Returns:
        Boolean: True if compatible, False otherwise (including unknown groups)
    """
    donor = parse_blood_group(donor_group)
    if donor is None:
        return False
    return donor in compatible_donors_for(recipient_group)


def compatible_donors_for(recipient_group):
    """
    Get the blood groups that can donate to a recipient

    Args:
        recipient_group: Recipient's blood group

    Returns:
        List of compatible donor blood groups, empty for unknown input
    """
    recipient = parse_blood_group(recipient_group)
    if recipient is None:
        return []
    return list(COMPATIBILITY[recipient])


def compatible_recipients_for(donor_group):
    """
    Get the blood groups that can receive from a donor

    Args:
        donor_group: Donor's blood group

    Returns:
        List of compatible recipient blood groups, empty for unknown input
    """
    donor = parse_blood_group(donor_group)
    if donor is None:
        return []
    return [recipient for recipient, donors in COMPATIBILITY.items() if donor in donors]
