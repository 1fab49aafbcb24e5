"""RNRSVP: RSVPs, agendas and calendar export for a recurring lunch."""
