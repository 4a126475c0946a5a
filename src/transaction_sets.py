from typing import Dict, Optional, NamedTuple


class TransactionSetTemplate(NamedTuple):
    name: str
    description: str


# Built-in transaction set templates, keyed by X12 transaction set code.
TRANSACTION_SET_TEMPLATES: Dict[str, TransactionSetTemplate] = {
    '204': TransactionSetTemplate('Motor Carrier Load Tender', 'Load tender'),
    '210': TransactionSetTemplate('Motor Carrier Freight Details and Invoice', 'Freight invoice'),
    '214': TransactionSetTemplate('Transportation Carrier Shipment Status Message', 'Shipment status'),
    '270': TransactionSetTemplate('Eligibility, Coverage or Benefit Inquiry', 'Healthcare eligibility inquiry'),
    '271': TransactionSetTemplate('Eligibility, Coverage or Benefit Information', 'Healthcare eligibility response'),
    '276': TransactionSetTemplate('Health Care Claim Status Request', 'Claim status request'),
    '277': TransactionSetTemplate('Health Care Claim Status Response', 'Claim status response'),
    '315': TransactionSetTemplate('Status Details (Ocean)', 'Ocean shipment status details'),
    '810': TransactionSetTemplate('Invoice', 'Invoice transaction set'),
    '820': TransactionSetTemplate('Payment Order/Remittance Advice', 'Payment information'),
    '834': TransactionSetTemplate('Benefit Enrollment and Maintenance', 'Enrollment transaction'),
    '835': TransactionSetTemplate('Health Care Claim Payment/Advice', 'Remittance advice'),
    '837': TransactionSetTemplate('Health Care Claim', 'Healthcare claim (Professional/Institutional/Dental)'),
    '850': TransactionSetTemplate('Purchase Order', 'Purchase order transaction set'),
    '855': TransactionSetTemplate('Purchase Order Acknowledgment', 'PO acknowledgment'),
    '856': TransactionSetTemplate('Ship Notice/Manifest', 'Advance ship notice (ASN)'),
    '990': TransactionSetTemplate('Response to a Load Tender', 'Load tender response'),
    '997': TransactionSetTemplate('Functional Acknowledgment', 'FA transaction set'),
    '999': TransactionSetTemplate('Implementation Acknowledgment', 'IA transaction set'),
}


def get_transaction_set_template(transaction_set_id: str) -> Optional[TransactionSetTemplate]:
    return TRANSACTION_SET_TEMPLATES.get(str(transaction_set_id).strip())


def fallback_name(transaction_set_id: str) -> str:
    return f"Transaction Set {transaction_set_id}"
