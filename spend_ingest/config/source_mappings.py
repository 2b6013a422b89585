"""Header candidate tables for the ad-platform and order exports.

Each logical field maps to an ordered list of accepted header spellings.
The first spelling found in a row wins, so the most specific or most
common export header is listed first.
"""

ADS_FIELDS = {
    "delivery_level": ["Delivery level", "Delivery Level"],
    "date": ["Reporting ends", "Date", "Reporting date"],
    "campaign_name": ["Campaign name", "Campaign Name", "Campaign"],
    "adset_name": ["Ad Set Name", "Ad set name"],
    "ad_name": ["Ad name", "Ad Name"],
    "spend_sgd": ["Amount spent (SGD)", "Amount Spent (SGD)"],
    "spend_bdt": ["Amount spent (BDT)", "Amount Spent (BDT)"],
    "messaging_conversations": ["Messaging conversations started"],
    "results": ["Results"],
    "impressions": ["Impressions"],
    "ctr_all": ["CTR (all)"],
    "frequency": ["Frequency"],
}

ORDERS_FIELDS = {
    "order_id": ["Invoice Number", "Order ID"],
    "order_date": ["Creation Date", "Order Date"],
    "order_status": ["Order Status", "Status"],
    "paid_amount": ["Paid Amount", "Paid Amount (BDT)"],
    "due_amount": ["Due Amount", "Due Amount (BDT)"],
    "conversation_id": ["Conversation ID"],
}

# Spreadsheet exports carry title/metadata rows above the real header.
HEADER_MARKER = "campaign name"
PREFERRED_SHEET = "Raw Data Report"
